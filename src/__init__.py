"""build-bpf: build a Cargo package for the BPF target and post-process it."""

__version__ = "0.1.0"
