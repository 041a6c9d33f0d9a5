"""Command line entry points for hanoi-tutor."""
