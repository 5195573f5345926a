"""Store bounded context: catalogue, shopping cart and the checkout ledger.

A single domain hosts every aggregate the checkout engine touches so that
reading the cart, writing the purchase and clearing the cart can share one
unit of work.
"""

from protean.domain import Domain

from store.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
store = Domain(name="store")
