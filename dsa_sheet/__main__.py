"""Module entrypoint for `python -m dsa_sheet`."""

from .cli import run

if __name__ == "__main__":
    run()
