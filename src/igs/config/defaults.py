"""Starter .igs.toml template."""

DEFAULT_TOML = """\
# igs configuration
version = "1.0"

[git]
executable = "git"
untracked = "normal"      # no | normal | all
timeout = 30              # seconds per git invocation

[diff]
color = true

[open]
# command = "code -r"     # empty = xdg-open / open / start

[colors]
staged = "green"
unstaged = "red"
cursor = "bold"

[keys]
file = ".igs-keys.yml"    # optional extra key bindings (YAML)
"""
