"""Store bounded context: catalogue, cart, checkout and purchase ledger."""
