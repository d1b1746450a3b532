"""GameHub leaderboard and live score update service."""
