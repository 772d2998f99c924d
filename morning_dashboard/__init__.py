"""Morning dashboard: next departure and event routines for a household."""
