from fractaledit.utils.timefmt import format_readout, format_seconds, format_time


def test_clip_span_labels():
    # placements are end-to-end, so the span labels chain
    assert format_time(0.0) == "00:00.000"
    assert format_time(5.0) == "00:05.000"
    assert format_time(55.0 + 10.0) == "01:05.000"
    assert format_time(17.75) == "00:17.750"


def test_clip_span_labels_round_half_up():
    assert format_time(0.1 * 3) == "00:00.300"
    assert format_time(2.0005) == "00:02.001"
    assert format_time(59.9996) == "01:00.000"
    assert format_time(-0.5) == "00:00.000"


def test_transport_readout():
    assert format_seconds(0) == "0.00s"
    assert format_seconds(0.1 * 3) == "0.30s"
    assert format_seconds(-2) == "0.00s"
    assert format_readout(12.3, 60) == "12.30s / 60.00s"
