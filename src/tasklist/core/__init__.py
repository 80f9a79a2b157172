"""
Core.

Components:
- ports.py: TaskRepo protocol consumed by the coordinator
- state.py: Observable container and AppState
- coordinator.py: TaskCoordinator (snapshot + operations)
"""
