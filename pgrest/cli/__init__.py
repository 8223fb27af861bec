"""pgrest command line interface."""
