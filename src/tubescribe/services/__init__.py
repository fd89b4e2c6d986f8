"""Service layer for tubescribe: caption fetching, the transcript store, search and the command facade."""
