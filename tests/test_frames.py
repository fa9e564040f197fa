import pytest

from gpiofeed.frames import (
    BUFFER_BYTES,
    BUFFER_FRAMES,
    FRAME_SIZE,
    GPIO_PIN_COUNT,
    GpioFrame,
    parse_buffer,
)


def test_frame_is_packed_without_padding():
    assert len(GpioFrame(0xAB, 7).to_bytes()) == FRAME_SIZE == 5


def test_to_bytes_layout_is_byte_then_little_endian_int32():
    assert GpioFrame(0x05, 3).to_bytes() == b"\x05\x03\x00\x00\x00"


@pytest.mark.parametrize(
    "gpio_byte,hold_s",
    [(0, 0), (255, 2**31 - 1), (0x81, -(2**31)), (0x5A, 12)],
)
def test_round_trip(gpio_byte, hold_s):
    frame = GpioFrame(gpio_byte, hold_s)
    assert GpioFrame.from_bytes(frame.to_bytes()) == frame


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        GpioFrame.from_bytes(b"\x01\x02\x03")


@pytest.mark.parametrize("gpio_byte", [-1, 256])
def test_gpio_byte_out_of_range(gpio_byte):
    with pytest.raises(ValueError):
        GpioFrame(gpio_byte, 1)


@pytest.mark.parametrize("hold_s", [2**31, -(2**31) - 1])
def test_hold_out_of_range(hold_s):
    with pytest.raises(ValueError):
        GpioFrame(1, hold_s)


@pytest.mark.parametrize("gpio_byte", [0, 1, 0x80, 0xA5, 0xFF])
def test_pin_states_rebuild_byte(gpio_byte):
    states = GpioFrame(gpio_byte, 0).pin_states()
    assert len(states) == GPIO_PIN_COUNT
    assert set(states) <= {0, 1}
    assert sum(bit << index for index, bit in enumerate(states)) == gpio_byte


def test_pin_zero_is_lowest_bit():
    states = GpioFrame(0b00000001, 0).pin_states()
    assert states[0] == 1
    assert sum(states) == 1


def test_describe():
    assert GpioFrame(0b101, 3).describe() == "GPIO: 00000101 | Hold: 3 s"


def test_parse_buffer_round_trip_full_buffer():
    frames = [GpioFrame(index % 256, index) for index in range(BUFFER_FRAMES)]
    data = b"".join(frame.to_bytes() for frame in frames)
    assert len(data) == BUFFER_BYTES
    assert parse_buffer(data) == frames


def test_parse_buffer_empty():
    assert parse_buffer(b"") == []


def test_parse_buffer_rejects_partial_frame():
    data = GpioFrame(1, 1).to_bytes() + b"\x00\x00"
    with pytest.raises(ValueError):
        parse_buffer(data)


def test_frames_are_immutable():
    frame = GpioFrame(1, 1)
    with pytest.raises(AttributeError):
        frame.gpio_byte = 2
    assert frame.gpio_byte == 1
    assert frame.to_bytes() == b"\x01\x01\x00\x00\x00"