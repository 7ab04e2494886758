"""Party state and registry.

Architecture Note:
    party/ is a stateful service layer. The registry owns the process
    context and every live Party; parties reach settings, directory and
    successor strategy through their registry.
"""

from partykit.party.party import Party
from partykit.party.registry import PartyRegistry

__all__ = [
    "Party",
    "PartyRegistry",
]
