"""Core data model: compatibility database and issue construction."""
