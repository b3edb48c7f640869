"""Built-in parser configurations seeded into every ParserRegistry.

Python 3.13+.
"""

from __future__ import annotations

import functools

from reltime.settings import BaseTimeKeywords, ParserConfiguration, TimeOffsetKeywords

__all__ = ["get_default_configurations"]


@functools.cache
def get_default_configurations() -> tuple[ParserConfiguration, ...]:
    """Pre-baked configurations, one per supported locale.

    English uses the same vocabulary as the invariant locale; registering it
    explicitly lets "en_*" locales resolve through the parent chain instead
    of the invariant fallback.
    """
    return (
        ParserConfiguration(
            locale="en",
            base_time=BaseTimeKeywords(
                now="NOW",
                current_second="SECOND",
                current_minute="MINUTE",
                current_hour="HOUR",
                current_day="DAY",
                current_week="WEEK",
                current_month="MONTH",
                current_year="YEAR",
            ),
            time_offset=TimeOffsetKeywords(
                milliseconds="MS",
                seconds="S",
                minutes="M",
                hours="H",
                days="D",
                weeks="W",
                months="MO",
                years="Y",
            ),
        ),
    )
