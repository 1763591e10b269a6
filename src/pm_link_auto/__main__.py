from __future__ import annotations

from pm_link_auto.ui.cli import main

main()
