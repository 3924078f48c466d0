"""fndeploy CLI — Typer-based command-line interface.

Provides the ``fndeploy`` command with subcommands for deploying the
functions of a service and listing supported runtimes.

All output uses Rich for formatted terminal display.
"""
