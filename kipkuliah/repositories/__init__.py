"""
Persistence adapters.

The SQL adapter is the primary store; the in-memory store stands in for it
whenever it is unreachable or a query fails. Services only talk to the
FallbackResolver carried by a DataContext.
"""
