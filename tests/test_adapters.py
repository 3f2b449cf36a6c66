# tests/test_adapters.py
from __future__ import annotations

import asyncio
import datetime as dt

import pytest

from adapters.nasa_sources import DailyPictureAdapter, NeoFeedAdapter, RoverImageryAdapter
from adapters.nasa_sources.neo_feed import NEO_FEED_PATH
from core.domain.queries import NeoById, NeoByRange, PictureRange, RoverPhotos, SinglePicture
from core.errors import DecodeError, InvalidQueryError
from factories import (
    ScriptedTransport,
    approach_payload,
    feed_payload,
    neo_payload,
    photo_payload,
    photos_page,
    picture_payload,
)


# ---------- Daily picture ----------

def test_single_picture_without_date_omits_date_param():
    transport = ScriptedTransport(lambda path, params: picture_payload("2024-03-01"))
    record = asyncio.run(DailyPictureAdapter(transport).fetch_single(SinglePicture()))

    assert transport.calls == [("/planetary/apod", {"thumbs": "true"})]
    assert record.date == dt.date(2024, 3, 1)
    assert record.hd_url == "https://apod.example/2024-03-01-hd.jpg"


def test_single_picture_formats_date_objects():
    transport = ScriptedTransport(lambda path, params: picture_payload("2024-03-01"))
    asyncio.run(DailyPictureAdapter(transport).fetch_single(SinglePicture(date=dt.date(2024, 3, 1))))

    assert transport.calls[0][1]["date"] == "2024-03-01"


def test_video_never_carries_hd_url():
    payload = picture_payload(
        "2024-03-02",
        media_type="video",
        url="https://www.youtube.com/embed/abc",
        thumbnail_url="https://img.youtube.com/abc.jpg",
    )
    transport = ScriptedTransport(lambda path, params: payload)
    record = asyncio.run(DailyPictureAdapter(transport).fetch_single(SinglePicture()))

    assert record.is_video
    assert record.hd_url is None
    assert record.url == "https://www.youtube.com/embed/abc"
    assert record.thumbnail_url == "https://img.youtube.com/abc.jpg"


def test_picture_missing_title_is_a_decode_error():
    payload = picture_payload()
    del payload["title"]
    transport = ScriptedTransport(lambda path, params: payload)

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(DailyPictureAdapter(transport).fetch_single(SinglePicture()))
    assert excinfo.value.field == "title"


def test_picture_unknown_media_type_is_a_decode_error():
    transport = ScriptedTransport(lambda path, params: picture_payload(media_type="other"))

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(DailyPictureAdapter(transport).fetch_single(SinglePicture()))
    assert excinfo.value.field == "media_type"


@pytest.mark.parametrize(
    "query",
    [
        PictureRange(start="2024-01-01"),
        PictureRange(end="2024-01-01"),
        PictureRange(start="2024-01-05", end="2024-01-01"),
        PictureRange(start="01/01/2024", end="2024-01-02"),
    ],
)
def test_picture_range_validation_happens_before_network(query):
    transport = ScriptedTransport(lambda path, params: [])

    with pytest.raises(InvalidQueryError):
        asyncio.run(DailyPictureAdapter(transport).fetch_range(query))
    assert transport.calls == []


def test_picture_range_decodes_list_and_reports_item_path():
    broken = picture_payload("2024-01-02")
    broken["url"] = 42
    transport = ScriptedTransport(lambda path, params: [picture_payload("2024-01-01"), broken])

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(DailyPictureAdapter(transport).fetch_range(PictureRange("2024-01-01", "2024-01-02")))
    assert excinfo.value.field == "[1].url"


def test_picture_range_accepts_single_object_response():
    transport = ScriptedTransport(lambda path, params: picture_payload("2024-01-01"))
    records = asyncio.run(DailyPictureAdapter(transport).fetch_range(PictureRange("2024-01-01", "2024-01-01")))

    assert [record.date for record in records] == [dt.date(2024, 1, 1)]
    assert transport.calls[0][1] == {"start_date": "2024-01-01", "end_date": "2024-01-01", "thumbs": "true"}


# ---------- Rover imagery ----------

@pytest.mark.parametrize("camera", [None, "", "ALL", "all", "  All "])
def test_no_filter_camera_is_omitted(camera):
    adapter = RoverImageryAdapter(ScriptedTransport(lambda path, params: {"photos": []}))
    path, params = adapter.build_request(RoverPhotos(rover="curiosity", sol=1000, camera=camera))

    assert path == "/mars-photos/api/v1/rovers/curiosity/photos"
    assert params == {"page": 1, "sol": 1000}


def test_camera_filter_is_forwarded_upper_cased():
    adapter = RoverImageryAdapter(ScriptedTransport(lambda path, params: {"photos": []}))
    _, params = adapter.build_request(RoverPhotos(rover="Curiosity", earth_date="2015-05-30", camera="navcam"), 3)

    assert params == {"page": 3, "earth_date": "2015-05-30", "camera": "NAVCAM"}


def test_sol_zero_is_a_valid_day():
    adapter = RoverImageryAdapter(ScriptedTransport(lambda path, params: {"photos": []}))
    _, params = adapter.build_request(RoverPhotos(rover="spirit", sol=0))

    assert params["sol"] == 0


@pytest.mark.parametrize(
    "query",
    [
        RoverPhotos(rover="curiosity"),
        RoverPhotos(rover="curiosity", sol=10, earth_date="2015-05-30"),
        RoverPhotos(rover="curiosity", sol=-1),
        RoverPhotos(rover="sojourner", sol=1),
        RoverPhotos(rover="curiosity", sol=1, page=0),
    ],
)
def test_rover_validation_happens_before_network(query):
    transport = ScriptedTransport(lambda path, params: {"photos": []})

    with pytest.raises(InvalidQueryError):
        asyncio.run(RoverImageryAdapter(transport).fetch_page(query))
    assert transport.calls == []


def test_rover_page_decodes_photos():
    transport = ScriptedTransport(lambda path, params: photos_page(100, 3))
    records = asyncio.run(RoverImageryAdapter(transport).fetch_page(RoverPhotos(rover="curiosity", sol=1000), 2))

    assert [record.id for record in records] == [100, 101, 102]
    assert transport.calls[0][1]["page"] == 2
    first = records[0]
    assert first.sol == 1000
    assert first.camera.name == "FHAZ"
    assert first.rover.landing_date == dt.date(2012, 8, 6)


def test_rover_photo_missing_nested_field_reports_path():
    photo = photo_payload(7)
    del photo["rover"]["status"]
    transport = ScriptedTransport(lambda path, params: {"photos": [photo_payload(6), photo]})

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(RoverImageryAdapter(transport).fetch_page(RoverPhotos(rover="curiosity", sol=1)))
    assert excinfo.value.field == "photos[1].rover.status"


def test_rover_response_without_photos_key_is_a_decode_error():
    transport = ScriptedTransport(lambda path, params: {"latest_photos": []})

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(RoverImageryAdapter(transport).fetch_page(RoverPhotos(rover="curiosity", sol=1)))
    assert excinfo.value.field == "photos"


# ---------- Near-Earth objects ----------

def test_neo_feed_decodes_buckets_and_numeric_strings():
    payload = feed_payload(
        {
            "2024-01-02": [neo_payload("2", approaches=[approach_payload("2024-01-02", velocity_kmh=61_000.5)])],
            "2024-01-01": [neo_payload("1", hazardous=True)],
        }
    )
    transport = ScriptedTransport(lambda path, params: payload)
    buckets = asyncio.run(NeoFeedAdapter(transport).fetch_feed(NeoByRange("2024-01-01", "2024-01-02")))

    assert transport.calls == [(NEO_FEED_PATH, {"start_date": "2024-01-01", "end_date": "2024-01-02"})]
    assert set(buckets) == {dt.date(2024, 1, 1), dt.date(2024, 1, 2)}
    record = buckets[dt.date(2024, 1, 2)][0]
    assert record.first_approach.relative_velocity_kmh == pytest.approx(61_000.5)
    assert record.estimated_diameter_m.min_m == 100.0
    assert buckets[dt.date(2024, 1, 1)][0].close_approaches == ()


def test_neo_feed_range_longer_than_limit_is_rejected():
    transport = ScriptedTransport(lambda path, params: feed_payload({}))

    with pytest.raises(InvalidQueryError):
        asyncio.run(NeoFeedAdapter(transport, max_range_days=7).fetch_feed(NeoByRange("2024-01-01", "2024-01-09")))
    assert transport.calls == []


def test_neo_velocity_must_be_numeric():
    approach = approach_payload("2024-01-01")
    approach["relative_velocity"]["kilometers_per_hour"] = "fast"
    payload = feed_payload({"2024-01-01": [neo_payload("1", approaches=[approach])]})
    transport = ScriptedTransport(lambda path, params: payload)

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(NeoFeedAdapter(transport).fetch_feed(NeoByRange("2024-01-01", "2024-01-01")))
    assert excinfo.value.field == (
        "near_earth_objects.2024-01-01[0].close_approach_data[0].relative_velocity.kilometers_per_hour"
    )


def test_neo_missing_hazard_flag_is_not_defaulted():
    payload = neo_payload("3542519")
    del payload["is_potentially_hazardous_asteroid"]
    transport = ScriptedTransport(lambda path, params: payload)

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(NeoFeedAdapter(transport).fetch_by_id(NeoById("3542519")))
    assert excinfo.value.field == "is_potentially_hazardous_asteroid"


def test_neo_lookup_path_and_blank_id():
    transport = ScriptedTransport(lambda path, params: neo_payload("3542519"))
    adapter = NeoFeedAdapter(transport)

    record = asyncio.run(adapter.fetch_by_id(NeoById(" 3542519 ")))
    assert record.id == "3542519"
    assert transport.calls == [("/neo/rest/v1/neo/3542519", {})]

    with pytest.raises(InvalidQueryError):
        asyncio.run(adapter.fetch_by_id(NeoById("  ")))
    assert len(transport.calls) == 1


def test_neo_feed_keys_for_the_same_day_are_merged():
    payload = {
        "element_count": 2,
        "near_earth_objects": {
            " 2024-01-01": [neo_payload("1")],
            "2024-01-01": [neo_payload("2")],
        },
    }
    transport = ScriptedTransport(lambda path, params: payload)
    buckets = asyncio.run(NeoFeedAdapter(transport).fetch_feed(NeoByRange("2024-01-01", "2024-01-01")))

    assert list(buckets) == [dt.date(2024, 1, 1)]
    assert [record.id for record in buckets[dt.date(2024, 1, 1)]] == ["1", "2"]


def test_neo_feed_bad_day_key_reports_its_path():
    payload = feed_payload({"yesterday": [neo_payload("1")]})
    transport = ScriptedTransport(lambda path, params: payload)

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(NeoFeedAdapter(transport).fetch_feed(NeoByRange("2024-01-01", "2024-01-01")))
    assert excinfo.value.field == "near_earth_objects.yesterday"


def test_neo_hazard_flag_is_not_coerced_from_strings():
    payload = neo_payload("3542519")
    payload["is_potentially_hazardous_asteroid"] = "false"
    transport = ScriptedTransport(lambda path, params: payload)

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(NeoFeedAdapter(transport).fetch_by_id(NeoById("3542519")))
    assert excinfo.value.field == "is_potentially_hazardous_asteroid"


def test_neo_infinite_miss_distance_is_rejected():
    payload = neo_payload("1", approaches=[approach_payload("2024-01-01")])
    payload["close_approach_data"][0]["miss_distance"]["kilometers"] = "inf"
    transport = ScriptedTransport(lambda path, params: payload)

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(NeoFeedAdapter(transport).fetch_by_id(NeoById("1")))
    assert excinfo.value.field == "close_approach_data[0].miss_distance.kilometers"


def test_picture_blank_optional_fields_become_none():
    transport = ScriptedTransport(lambda path, params: picture_payload(copyright="  ", hdurl=""))
    record = asyncio.run(DailyPictureAdapter(transport).fetch_single(SinglePicture()))

    assert record.copyright is None
    assert record.hd_url is None


def test_rover_photo_id_must_be_an_integer():
    photo = photo_payload(7)
    photo["id"] = "7"
    transport = ScriptedTransport(lambda path, params: {"photos": [photo]})

    with pytest.raises(DecodeError) as excinfo:
        asyncio.run(RoverImageryAdapter(transport).fetch_page(RoverPhotos(rover="curiosity", sol=1)))
    assert excinfo.value.field == "photos[0].id"
