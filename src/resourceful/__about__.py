__version__ = "0.1.0"
__description__ = "Declarative binding of web API payloads to resources"
