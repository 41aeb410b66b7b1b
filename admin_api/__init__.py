"""Admin console for editing portfolio data per stage."""
