"""Async Helix client with the Get Users endpoint, endpoint groups and typed errors."""