"""Allow ``python -m ringclock``."""

from ringclock._cli import main

main()
