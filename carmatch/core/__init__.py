"""Application-wide setup shared by the API and scripts."""
