"""EZTeach account lifecycle and game leaderboard service."""
