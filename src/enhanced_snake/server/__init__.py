"""FastAPI front end serving single-player snake sessions."""
