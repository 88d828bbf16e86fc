"""Dynasty auction valuation for MyFantasyLeague leagues."""
