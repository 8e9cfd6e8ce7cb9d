"""Domain errors raised by the asset services; the routes map them to HTTP statuses."""


class AssetError(Exception):
    """Base class for asset hierarchy errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AssetNotFoundError(AssetError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class AssetForbiddenError(AssetError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NonLeafValuationError(AssetError):
    """A valuation was written to an item that has children."""

    def __init__(self, item_id: int):
        super().__init__("Valuations are only allowed on leaf items")
        self.item_id = item_id


class InvalidMonthError(AssetError):
    def __init__(self, value):
        super().__init__(f"Invalid month: {value!r} (expected YYYY-MM or YYYY-MM-01)")
        self.value = value


class AssetCycleError(AssetError):
    """The parent chain of an item loops back on itself."""

    status_code = 500

    def __init__(self, item_id: int):
        super().__init__(f"Asset item {item_id} is part of a parent cycle")
        self.item_id = item_id
