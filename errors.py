class TradeDashboardError(Exception):
    pass


class TradeQueryError(TradeDashboardError):
    """The backend trade query did not complete successfully."""


class InvalidTradeError(TradeDashboardError):
    """A trade record cannot be displayed, usually because it has no gid."""
