"""Starter .rerender.toml template."""

DEFAULT_TOML = """\
# Rerender Configuration
version = "1.0"

[scan]
max_input_kb = 256        # inputs above this size are rejected by the CLI and server
fail_on = "high"          # info | low | medium | high — exit 1 at or above this level

[output]
format = "terminal"       # terminal | json | sarif
show_summary = true
explain = false           # print the why/fix text under each issue

[rules]
# enable = ["A001", "B001"]   # empty = all enabled
# disable = ["E001"]

[allowlist]
# safe_state_initializers = ["useInitialCount"]

[server]
cors_origins = ["*"]
"""
