"""
Entry point for running camera-notifier as a module.

This allows running the package with: python -m camnotify
"""

from .cli import main

if __name__ == '__main__':
    main()
