"""Entry point for running fabula as a module."""

# The console loop in repl.py is the error boundary for commands, and main()
# in cli.py handles startup errors (manifest, resources, saves).

from fabula.cli import main

if __name__ == "__main__":
    main()
