"""Unit tests for TrackmaniaClient."""

from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from totd_bot.adapters.trackmania.client import (
    CORE_API_BASE,
    LIVE_API_BASE,
    MEET_API_BASE,
    TrackmaniaAPIError,
    TrackmaniaClient,
)
from totd_bot.config import NadeoConfig
from totd_bot.domain.models import TrackRef

NOW = datetime(2024, 5, 3, 18, 0, tzinfo=timezone.utc)
MAY_2 = int(datetime(2024, 5, 2, 17, 0, tzinfo=timezone.utc).timestamp())
MAY_3 = int(datetime(2024, 5, 3, 17, 0, tzinfo=timezone.utc).timestamp())
MAY_4 = int(datetime(2024, 5, 4, 17, 0, tzinfo=timezone.utc).timestamp())

CALENDAR = {"monthList": [{"year": 2024, "month": 5, "days": [
    {"monthDay": 2, "mapUid": "MAP2", "seasonUid": "SEASON", "startTimestamp": MAY_2, "endTimestamp": MAY_3},
    {"monthDay": 3, "mapUid": "MAP3", "seasonUid": "SEASON", "startTimestamp": MAY_3, "endTimestamp": MAY_4},
    {"monthDay": 4, "mapUid": "", "seasonUid": "SEASON", "startTimestamp": MAY_4, "endTimestamp": MAY_4 + 86400},
]}]}

MAP3 = [{
    "mapUid": "MAP3", "name": "Sunny Loops", "author": "acc-1", "thumbnailUrl": "https://img/3.jpg",
    "authorScore": 45123, "goldScore": 48000, "silverScore": 54000, "bronzeScore": 68000,
}]


def _mock_aiohttp_session(responses, calls):
    """responses: list of (status, data) consumed in order by get() calls."""
    call_idx = 0

    class FakeResponse:
        def __init__(self, status, data):
            self.status = status
            self._data = data

        async def json(self):
            return self._data

        async def text(self):
            return str(self._data)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def get(self, url, **kwargs):
            nonlocal call_idx
            calls.append((url, kwargs))
            status, data = responses[call_idx]
            call_idx += 1
            return FakeResponse(status, data)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


@pytest.fixture
def client():
    return TrackmaniaClient(
        NadeoConfig(live_token="live", core_token="core"), page_size=25, clock=lambda: NOW,
    )


def _patched(responses, calls):
    return patch(
        "totd_bot.adapters.trackmania.client.aiohttp.ClientSession",
        _mock_aiohttp_session(responses, calls),
    )


class TestTrackOfTheDay:
    @pytest.mark.asyncio
    async def test_current(self, client):
        calls = []
        with _patched([(200, CALENDAR), (200, MAP3)], calls):
            track = await client.track_of_the_day()

        assert track["mapUid"] == "MAP3"
        assert track["name"] == "Sunny Loops"
        assert track["groupUid"] == "SEASON"
        assert track["endTimestamp"] == MAY_4
        assert track["date"] == "2024-05-03"
        assert track["label"] == "Track of the Day - 2024-05-03"
        url, kwargs = calls[0]
        assert url == f"{LIVE_API_BASE}/campaign/month"
        assert kwargs["params"] == {"length": 1, "offset": 0}
        assert kwargs["headers"]["Authorization"] == "nadeo_v1 t=live"
        assert calls[1][0] == f"{CORE_API_BASE}/maps/"
        assert calls[1][1]["headers"]["Authorization"] == "nadeo_v1 t=core"

    @pytest.mark.asyncio
    async def test_past_day_uses_month_offset(self, client):
        calendar = {"monthList": [{"days": [
            {"monthDay": 14, "mapUid": "OLD", "seasonUid": "S", "startTimestamp": 1, "endTimestamp": 2},
        ]}]}
        calls = []
        with _patched([(200, calendar), (200, [{"mapUid": "OLD", "name": "Old"}])], calls):
            track = await client.track_of_the_day(date(2023, 11, 14))
        assert calls[0][1]["params"]["offset"] == 6
        assert track["mapUid"] == "OLD"

    @pytest.mark.asyncio
    async def test_month_offset_uses_configured_timezone(self):
        # 2024-05-31T13:00Z is 2024-06-01 01:00 in Auckland.
        client = TrackmaniaClient(
            NadeoConfig(live_token="live", core_token="core"),
            tz="Pacific/Auckland",
            clock=lambda: datetime(2024, 5, 31, 13, 0, tzinfo=timezone.utc),
        )
        calendar = {"monthList": [{"days": [
            {"monthDay": 1, "mapUid": "JUNE1", "seasonUid": "S", "startTimestamp": 1, "endTimestamp": 2},
        ]}]}
        calls = []
        with _patched([(200, calendar), (200, [{"mapUid": "JUNE1", "name": "June First"}])], calls):
            track = await client.track_of_the_day(date(2024, 6, 1))
        assert calls[0][1]["params"] == {"length": 1, "offset": 0}
        assert track["mapUid"] == "JUNE1"

    @pytest.mark.asyncio
    async def test_future_month_is_rejected_without_request(self, client):
        calls = []
        with _patched([], calls):
            with pytest.raises(TrackmaniaAPIError, match="yet"):
                await client.track_of_the_day(date(2024, 6, 1))
        assert calls == []

    @pytest.mark.asyncio
    async def test_missing_day(self, client):
        with _patched([(200, CALENDAR)], []):
            with pytest.raises(TrackmaniaAPIError, match="no Track of the Day"):
                await client.track_of_the_day(date(2024, 5, 20))

    @pytest.mark.asyncio
    async def test_http_error(self, client):
        with _patched([(401, "unauthorized")], []):
            with pytest.raises(TrackmaniaAPIError, match="401"):
                await client.track_of_the_day()


class TestTrackInfo:
    @pytest.mark.asyncio
    async def test_label_and_group(self, client):
        with _patched([(200, MAP3)], []):
            track = await client.get_track_info("Map Search", "MAP3", "GROUP")
        assert track["label"] == "Map Search"
        assert track["groupUid"] == "GROUP"
        assert track["authorScore"] == 45123

    @pytest.mark.asyncio
    async def test_default_group(self, client):
        with _patched([(200, MAP3)], []):
            track = await client.get_track_info("Map Search", "MAP3")
        assert track["groupUid"] == "Personal_Best"

    @pytest.mark.asyncio
    async def test_unknown_map(self, client):
        with _patched([(200, [])], []):
            with pytest.raises(TrackmaniaAPIError, match="map not found"):
                await client.get_track_info("Map Search", "NOPE")


class TestLeaderboard:
    @pytest.mark.asyncio
    async def test_page(self, client):
        data = {"tops": [{"zoneName": "World", "top": [
            {"accountId": "a1", "position": 751, "score": 47000},
            {"accountId": "a2", "position": 752, "score": 47010},
        ]}]}
        calls = []
        with _patched([(200, data)], calls):
            board = await client.leaderboard(TrackRef("x", "G1", "M1"), cursor=750)
        url, kwargs = calls[0]
        assert url == f"{LIVE_API_BASE}/leaderboard/group/G1/map/M1/top"
        assert kwargs["params"] == {"length": 25, "offset": 750, "onlyWorld": "true"}
        assert board["offset"] == 750
        assert [r["position"] for r in board["records"]] == [751, 752]

    @pytest.mark.asyncio
    async def test_reverse_orders_fastest_first(self, client):
        data = {"tops": [{"top": [
            {"accountId": "a2", "position": 2, "score": 47010},
            {"accountId": "a1", "position": 1, "score": 47000},
        ]}]}
        with _patched([(200, data)], []):
            fastest_first = await client.leaderboard(TrackRef("x", "G1", "M1"), None, True)
        with _patched([(200, data)], []):
            slowest_first = await client.leaderboard(TrackRef("x", "G1", "M1"), None, False)
        assert [r["position"] for r in fastest_first["records"]] == [1, 2]
        assert [r["position"] for r in slowest_first["records"]] == [2, 1]

    @pytest.mark.asyncio
    async def test_extra_sets_length_and_is_capped(self, client):
        calls = []
        with _patched([(200, {"tops": [{"top": []}]})], calls):
            board = await client.leaderboard(TrackRef("x", "G1", "M1"), None, extra="500")
        assert calls[0][1]["params"]["length"] == 100
        assert calls[0][1]["params"]["offset"] == 0
        assert board["records"] == []

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, client):
        with _patched([(200, {"tops": []})], []):
            with pytest.raises(TrackmaniaAPIError):
                await client.leaderboard(TrackRef("x", "G1", "M1"))


class TestCupOfTheDay:
    @pytest.mark.asyncio
    async def test_current(self, client):
        data = {"edition": 1, "competition": {"name": "COTD 2024-05-03 #1"}, "startDate": 10, "endDate": 20}
        calls = []
        with _patched([(200, data)], calls):
            cup = await client.cup_of_the_day()
        assert calls[0][0] == f"{MEET_API_BASE}/cup-of-the-day/current"
        assert cup == {"name": "COTD 2024-05-03 #1", "edition": 1, "startTimestamp": 10, "endTimestamp": 20}

    @pytest.mark.asyncio
    async def test_none_scheduled(self, client):
        with _patched([(200, {})], []):
            with pytest.raises(TrackmaniaAPIError):
                await client.cup_of_the_day()


class TestIsConfigured:
    def test_configured(self, client):
        assert client.is_configured is True

    def test_unconfigured(self):
        assert TrackmaniaClient(NadeoConfig()).is_configured is False
