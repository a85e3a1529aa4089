"""
quickpush: stage, commit and push in one command

Usage:
    Run inside a Git repository:
    $ quickpush fix login redirect

    The tool will:
    1. Stop early if the working tree has nothing to commit
    2. Use the given words as the commit message, or ask for one
       (an empty answer gives "Update: <current date and time>")
    3. Stage all changes
    4. Commit them
    5. Push the current branch to origin

Any failing step ends the run with exit code 1.
"""

__version__ = "1.0.0"
__author__ = "Alaamer"

from .main import push_changes

__all__ = ['push_changes', '__version__', '__author__']
