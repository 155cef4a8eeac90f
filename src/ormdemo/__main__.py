"""``python -m ormdemo``"""

from ormdemo.cli.app import app

app()
