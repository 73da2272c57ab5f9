#!/usr/bin/env python
"""Desktop app entrypoint for Ledgr."""

import flet as ft

from ledgr.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
