"""
Command line entry points.

    python -m scripts.parse_names    Parse data/<year>.html into the JSON artifact
    python -m scripts.import_names   Load the JSON artifact into the SQLite store
    python -m scripts.init_db        Create the store schema without loading data
    python -m scripts.name_stats     Print name statistics from the JSON artifact
"""
