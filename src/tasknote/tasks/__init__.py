"""
Task subsystem.

Components:
- task_models.py: data structures (Task) and timestamp helpers
- task_codec.py: one-line tab-delimited record encoding + fallible parse helpers
- task_store.py: flat-file storage holding the ordered task list
"""
