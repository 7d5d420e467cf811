"""Starter .gitoscope.toml template."""

DEFAULT_TOML = """\
# gitoscope configuration
version = "1.0"

[repository]
path = "."                # repository to inspect, relative to this file
git_timeout = 30          # seconds allowed per git invocation
include_ignored = false   # report ignored files in status

[diff]
context_lines = 0         # context lines around each extracted hunk

[output]
format = "terminal"       # terminal | json | yaml

[logging]
level = "WARNING"         # TRACE | DEBUG | INFO | SUCCESS | WARNING | ERROR | CRITICAL
# file = "gitoscope.log"
# rotation = "10 MB"
"""
