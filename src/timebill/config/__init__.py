"""Runtime configuration for timebill."""
