"""
Task subsystem.

Components:
- task_models.py: data structures (Task, RepoState, RepoStatus)
- task_codec.py: JSON encoding of the whole task list
- task_repository.py: in-memory list + write-through to a BlobStore
- task_api.py: small helpers used by the console view
"""
