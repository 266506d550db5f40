from gxbuild.cli.app import main

main()
