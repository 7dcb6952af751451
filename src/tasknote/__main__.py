from tasknote.cli.main import main

main()
