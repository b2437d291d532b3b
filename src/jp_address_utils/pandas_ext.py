from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from jp_address_utils.core.normalizer import NormalizeOptions, normalize

if TYPE_CHECKING:
    import pandas as pd

    from jp_address_utils.service import JapanAddressService


class JapanAddressAccessor:
    """Pandas accessor for Japanese address data.

    Usage:
        >>> from jp_address_utils.pandas_ext import register_accessor
        >>> register_accessor()
        >>> df = pd.DataFrame({"address": ["東京都千代田区千代田"]})
        >>> df["address"].jpaddr.validate(service)
    """

    def __init__(self, pandas_obj: pd.Series) -> None:
        self._obj = pandas_obj

    def normalize(self, options: Optional[NormalizeOptions] = None) -> pd.Series:
        """Normalized text for every entry; missing values stay missing."""
        import pandas as pd

        return self._obj.map(
            lambda x: normalize(str(x), options).normalized if pd.notna(x) else None
        )

    def validate(self, service: JapanAddressService, *, prefix: str = "") -> pd.DataFrame:
        """Validation columns for every entry.

        Args:
            service: Loaded JapanAddressService.
            prefix: Prefix for the column names.

        Returns:
            DataFrame with valid, confidence, normalized_address,
            postal_code and issues columns, indexed like the Series.
        """
        column = "_address"
        frame = self._obj.to_frame(name=column)
        result = service.validate_dataframe(frame, column, prefix=prefix, inplace=True)
        return result.drop(columns=[column])

    def postal_lookup(self, service: JapanAddressService) -> pd.Series:
        """First full address for every postal code entry (None if not found)."""
        import pandas as pd

        def _lookup(value: Any) -> Optional[str]:
            if pd.isna(value):
                return None
            result = service.postal_to_address(str(value))
            return result.addresses[0].full_address if result.success else None

        return self._obj.map(_lookup)


def register_accessor(name: str = "jpaddr") -> None:
    """Register the accessor on pandas Series.

    After calling this, you can use:
        >>> series.jpaddr.normalize()

    Args:
        name: Name for the accessor (default: "jpaddr").
    """
    import pandas as pd

    pd.api.extensions.register_series_accessor(name)(JapanAddressAccessor)
