from uptimed.cli import cli

cli(prog_name="uptimed")
