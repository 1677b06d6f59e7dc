"""A small inversion-of-control container keyed by interface type."""

from __future__ import annotations

from typing import Any, Callable


def _describe(interface: Any) -> str:
    return getattr(interface, "__qualname__", None) or repr(interface)


class ResolutionError(LookupError):
    """Raised when no provider is registered for a requested interface."""

    def __init__(self, interface: Any) -> None:
        self.interface = interface
        super().__init__(f"no provider registered for {_describe(interface)}")


class IOCContainer:
    """Maps interfaces to providers and resolves their dependencies on request.

    Dependencies are named by the interfaces they are registered under and are
    resolved from this container each time a provider runs.
    """

    def __init__(self) -> None:
        self._providers: dict[Any, Callable[[], Any]] = {}

    def __contains__(self, interface: Any) -> bool:
        return interface in self._providers

    def _resolve_all(self, dependencies: tuple[Any, ...]) -> list[Any]:
        return [self.get_instance(dependency) for dependency in dependencies]

    def register_instance(self, interface: Any, instance: Any) -> None:
        """Always hand out ``instance`` for ``interface``."""
        self._providers[interface] = lambda: instance

    def register_functor(self, interface: Any, functor: Callable[..., Any], *args: Any) -> None:
        """Call ``functor`` with the resolved ``args`` on every request."""

        def provide() -> Any:
            return functor(*self._resolve_all(args))

        self._providers[interface] = provide

    def register_factory(self, interface: Any, concrete: Callable[..., Any], *args: Any) -> None:
        """Construct a fresh ``concrete`` for every request."""
        self.register_functor(interface, concrete, *args)

    def register_singleton(self, interface: Any, concrete: Callable[..., Any], *args: Any) -> None:
        """Construct one ``concrete`` now and hand it out from then on."""
        self.register_instance(interface, concrete(*self._resolve_all(args)))

    def get_instance(self, interface: Any) -> Any:
        """Return the object provided for ``interface``."""
        try:
            provider = self._providers[interface]
        except KeyError:
            raise ResolutionError(interface) from None
        return provider()