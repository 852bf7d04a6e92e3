"""setlist - playlist management and playback ordering."""
