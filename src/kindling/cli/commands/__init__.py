# ABOUTME: Subcommand modules for the Kindling CLI.
# ABOUTME: Each module defines one Click command registered on the root group.
