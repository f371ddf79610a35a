from sdl_import.cli import cli

cli()
