"""
LangGraph conversation flow for truck parts chat

Architecture:
- State: Messages plus the four truck slots (make, model, year, part type)
- Nodes: determine step, gather info, search, format results
- Edges: Fall through the stages; missing slots end the turn with a question
"""
