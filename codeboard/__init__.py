"""
CodeBoard.

- backend/: Note store, query engine, stats reporter, REST API, configuration
"""
