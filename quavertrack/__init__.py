"""Chart computations for the quavertrack player-stats dashboard."""
