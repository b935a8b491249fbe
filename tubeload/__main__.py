"""Allow `python -m tubeload`."""
from .cli.main import main

main()
