"""Constants shared between the runtime and the web UI."""
