"""Main entry point for lexitrack."""
from lexitrack.cli import app

if __name__ == "__main__":
    app()
