"""
Entry point for running the API as a module.

Usage:
    python -m txviewer_api
"""

from txviewer_api.main import run

if __name__ == "__main__":
    run()
