"""WebGIS demo backend: accounts, feedback and admin responses over JSON files."""
