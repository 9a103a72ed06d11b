from dotenv import load_dotenv
load_dotenv()

__version__ = "0.1.0"

# Expose key classes for easier imports
from .models import ClassificationResult, PointerType, AddressFamily, LookupResult
from .resolver import PointerResolver
from .cache import ResponseCache
from .batch import BatchCoordinator
from .chain_client import ChainQueryClient
