"""Core configuration, manifest I/O and theming for scaffoldctl."""
