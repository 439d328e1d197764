import pytest
from moviepy import ColorClip

from fractaledit.core.assets import Asset, AssetRegistry, MediaKind
from fractaledit.media.probe import probe_duration


def test_asset_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        Asset(name="x", kind=MediaKind.VIDEO, source="/x", nominal_duration=-1)
    with pytest.raises(ValueError):
        Asset(name="x", kind=MediaKind.VIDEO, source="/x", nominal_duration=0)


def test_asset_kind_is_closed_enum():
    assert Asset(name="x", kind="AUDIO", source="/x").kind is MediaKind.AUDIO
    with pytest.raises(ValueError):
        Asset(name="x", kind="SUBTITLE", source="/x")


def test_asset_is_immutable():
    asset = Asset(name="x", kind=MediaKind.VIDEO, source="/x")
    with pytest.raises(AttributeError):
        asset.name = "y"


@pytest.mark.parametrize(
    "mime, kind",
    [
        ("video/mp4", MediaKind.VIDEO),
        ("audio/mpeg", MediaKind.AUDIO),
        ("image/png", MediaKind.IMAGE),
        ("application/octet-stream", MediaKind.IMAGE),
        (None, MediaKind.IMAGE),
    ],
)
def test_kind_from_mime(mime, kind):
    assert MediaKind.from_mime(mime) is kind


def test_import_file_reads_duration_and_upper_cases_name():
    registry = AssetRegistry()
    calls = []

    def prober(path, kind):
        calls.append((path, kind))
        return 12.5

    asset = registry.import_file("/footage/intro.mp4", prober=prober)
    assert asset.name == "INTRO.MP4"
    assert asset.kind is MediaKind.VIDEO
    assert asset.nominal_duration == 12.5
    assert calls == [("/footage/intro.mp4", MediaKind.VIDEO)]
    assert asset.id in registry and registry.get(asset.id) is asset


def test_import_falls_back_to_import_duration():
    registry = AssetRegistry()
    asset = registry.import_file("/music/theme.wav", prober=lambda p, k: None)
    assert asset.kind is MediaKind.AUDIO
    assert asset.nominal_duration == 10


def test_registry_order_and_filters():
    registry = AssetRegistry()
    a = registry.register_generated("GEN_01", MediaKind.VIDEO, "https://gen/1", 8)
    b = registry.import_file("/stills/cover.png", prober=lambda p, k: None)
    assert list(registry) == [a, b]
    assert len(registry) == 2
    assert registry.by_kind(MediaKind.IMAGE) == [b]
    with pytest.raises(ValueError):
        registry.add(a)


def test_reads_video_duration(tmp_path):
    path = tmp_path / "green.mp4"
    clip = ColorClip(size=(32, 32), color=(0, 255, 0), duration=0.5)
    clip.write_videofile(str(path), fps=24, logger=None)
    clip.close()
    assert probe_duration(str(path), MediaKind.VIDEO) == pytest.approx(0.5, abs=0.05)


def test_images_have_no_media_duration(tmp_path):
    assert probe_duration(str(tmp_path / "still.png"), MediaKind.IMAGE) is None


@pytest.mark.parametrize("duration", [float("nan"), float("inf"), float("-inf")])
def test_asset_rejects_non_finite_duration(duration):
    with pytest.raises(ValueError):
        Asset(name="x", kind=MediaKind.AUDIO, source="/x", nominal_duration=duration)
