from workerpack.cli.main_cli import main

main()
