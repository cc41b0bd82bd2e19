"""Command-line interface for build-bpf."""
