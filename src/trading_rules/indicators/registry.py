from typing import Callable, Dict, List

from trading_rules.indicators.base import Indicator


class IndicatorRegistry:
    """Registry of indicator factories by name"""
    _indicators: Dict[str, Callable[..., Indicator]] = {}

    @classmethod
    def register(cls, name: str = None):
        """Decorator to register an indicator class or factory function"""
        def decorator(factory: Callable[..., Indicator]):
            indicator_name = name or factory.__name__
            cls._indicators[indicator_name] = factory
            return factory
        return decorator

    @classmethod
    def get_indicator(cls, name: str) -> Callable[..., Indicator]:
        """Get indicator factory by name"""
        return cls._indicators.get(name)

    @classmethod
    def create(cls, name: str, *args, **kwargs) -> Indicator:
        """Build a registered indicator; unknown names raise KeyError"""
        if name not in cls._indicators:
            raise KeyError(f"No indicator registered as '{name}'")
        return cls._indicators[name](*args, **kwargs)

    @classmethod
    def list_indicators(cls) -> List[str]:
        """List all registered indicators"""
        return list(cls._indicators.keys())
