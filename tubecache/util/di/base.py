from dishka import Provider as _DishkaProvider

from tubecache.util.di.scope import Scope


class Provider(_DishkaProvider):
    """Base for tubecache DI providers.

    Factories default to the application scope; request-bound handlers
    declare ``scope=Scope.REQUEST`` explicitly.
    """

    scope = Scope.APP
