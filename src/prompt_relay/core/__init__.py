"""Core functionality for prompt-relay.

Import from the submodules directly (``prompt_relay.core.bootstrap``,
``prompt_relay.core.exceptions``); the configuration layer depends on
``core.exceptions`` so this package stays free of eager imports.
"""
