"""Action layer — the named, schema-validated calls exposed to assistants."""

from stackscout.actions.dispatcher import ACTIONS, Action, ActionDispatcher, Resolvers

__all__ = ["ACTIONS", "Action", "ActionDispatcher", "Resolvers"]
