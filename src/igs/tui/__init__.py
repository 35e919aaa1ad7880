"""Interactive status list: entries, rendering, key handling, loop."""
