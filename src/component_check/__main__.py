"""Allow ``python -m component_check``."""

from .cli import main

main()
