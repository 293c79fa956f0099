"""
Initialize the CLI package. Contains the typer application and its commands.
"""
