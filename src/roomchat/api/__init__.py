"""HTTP API for roomchat."""
