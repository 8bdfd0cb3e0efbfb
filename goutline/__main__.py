"""Allow ``python -m goutline``."""
from goutline.cli import main

main()
