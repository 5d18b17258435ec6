"""
terminaltask - an interactive task manager for the terminal.

Architecture:
- task.py: Task entity
- providers.py / store.py / service.py: persistence (protocols + file implementation)
- form.py / state.py: the edit form and root state machine (pure transitions)
- effects.py: runs persistence effects and turns their results into messages
- views/: Textual widgets rendering the state
- app.py: Textual application wiring input, state and effects together
"""

__version__ = "0.1.0"
