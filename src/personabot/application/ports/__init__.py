from .memory_store_port import MemoryStorePort
from .template_provider_port import TemplateProviderPort

__all__ = ["MemoryStorePort", "TemplateProviderPort"]
