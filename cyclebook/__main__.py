"""
The primary entry point to the application.
"""

from cyclebook.cli import run

if __name__ == '__main__':
    run()
