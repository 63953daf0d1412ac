# Keeps the project root importable so tests can load main_cli.
