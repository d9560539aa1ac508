#!/usr/bin/env python3
"""
Main entry point for the Twitch chat bridge
"""

from twitch_bridge.cli import run

if __name__ == "__main__":
    run()
