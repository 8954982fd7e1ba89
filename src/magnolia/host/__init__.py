"""Host collaborators — the document views render into and the session history."""
