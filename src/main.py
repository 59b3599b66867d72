"""Main entry point for the daily note job."""
from cli import cli


def main():
    cli()

if __name__ == "__main__":
    main()
