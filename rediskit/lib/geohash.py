"""Geohash encoding and neighbour search on 64-bit codes."""

from __future__ import annotations

import base64
import math
import struct

_STD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_GEO_ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"
_TO_GEO = str.maketrans(_STD_ALPHABET, _GEO_ALPHABET)

_DEFAULT_BIT_SIZE = 64  # 32 bits for latitude, 32 for longitude
_MASK64 = (1 << 64) - 1

_DR = math.pi / 180.0
_EARTH_RADIUS = 6372797.560856
_MERCATOR_MAX = 20037726.37


def _encode(latitude: float, longitude: float, bit_size: int) -> tuple[bytes, list[list[float]]]:
    box = [[-180.0, 180.0], [-90.0, 90.0]]  # lng, lat
    pos = (longitude, latitude)
    out = bytearray()
    bit = 0
    precision = 0
    code = 0
    while precision < bit_size:
        for direction, val in enumerate(pos):
            low, high = box[direction]
            mid = (low + high) / 2
            if val < mid:
                box[direction][1] = mid
            else:
                box[direction][0] = mid
                code |= 0x80 >> bit
            bit += 1
            if bit == 8:
                out.append(code)
                bit = 0
                code = 0
            precision += 1
            if precision == bit_size:
                break
    if code > 0:
        out.append(code)
    return bytes(out), box


def _decode(hash_bytes: bytes) -> list[list[float]]:
    box = [[-180.0, 180.0], [-90.0, 90.0]]
    direction = 0
    for code in hash_bytes:
        for j in range(8):
            mid = (box[direction][0] + box[direction][1]) / 2
            if code & (0x80 >> j):
                box[direction][0] = mid
            else:
                box[direction][1] = mid
            direction ^= 1
    return box


def to_int(buf: bytes) -> int:
    """Read a geohash byte string as a big-endian 64-bit code, padding on the right."""
    return struct.unpack(">Q", bytes(buf[:8]).ljust(8, b"\x00"))[0]


def from_int(code: int) -> bytes:
    """Convert a 64-bit code to 8 big-endian bytes."""
    return struct.pack(">Q", code & _MASK64)


def encode(latitude: float, longitude: float) -> int:
    """Encode a coordinate to a 64-bit geohash code."""
    buf, _ = _encode(latitude, longitude, _DEFAULT_BIT_SIZE)
    return to_int(buf)


def decode(code: int) -> tuple[float, float]:
    """Decode a 64-bit geohash code to ``(latitude, longitude)``."""
    box = _decode(from_int(code))
    lng = (box[0][0] + box[0][1]) / 2
    lat = (box[1][0] + box[1][1]) / 2
    return lat, lng


def to_string(buf: bytes) -> str:
    """Render geohash bytes in geohash base32, without padding."""
    return base64.b32encode(bytes(buf)).decode().rstrip("=").translate(_TO_GEO)


def to_range(scope: bytes, precision: int) -> tuple[int, int]:
    """Convert a geohash prefix of ``precision`` bits to a code range [lower, upper)."""
    lower = to_int(scope)
    radius = (1 << (64 - precision)) & _MASK64
    return lower, (lower + radius) & _MASK64


def _estimate_precision_by_radius(radius_meters: float, latitude: float) -> int:
    if radius_meters == 0:
        return _DEFAULT_BIT_SIZE - 1
    precision = 1
    while radius_meters < _MERCATOR_MAX:
        radius_meters *= 2
        precision += 1
    # unsigned arithmetic: underflow wraps and is then clamped to the maximum
    precision = (precision - 2) & _MASK64
    if latitude > 66 or latitude < -66:
        precision = (precision - 1) & _MASK64
        if latitude > 80 or latitude < -80:
            precision = (precision - 1) & _MASK64
    precision = min(max(precision, 1), 32)
    return precision * 2 - 1


def distance(latitude1: float, longitude1: float, latitude2: float, longitude2: float) -> float:
    """Great-circle distance in metres between two coordinates."""
    rad_lat1 = latitude1 * _DR
    rad_lat2 = latitude2 * _DR
    a = rad_lat1 - rad_lat2
    b = longitude1 * _DR - longitude2 * _DR
    return 2 * _EARTH_RADIUS * math.asin(math.sqrt(
        math.sin(a / 2) ** 2 + math.cos(rad_lat1) * math.cos(rad_lat2) * math.sin(b / 2) ** 2
    ))


def _valid_lat(lat: float) -> float:
    return max(-90.0, min(90.0, lat))


def _valid_lng(lng: float) -> float:
    if lng > 180:
        return -360 + lng
    if lng < -180:
        return 360 + lng
    return lng


def get_neighbours(latitude: float, longitude: float, radius_meters: float) -> list[tuple[int, int]]:
    """Return code ranges of the nine blocks around a coordinate, row by row from the top left."""
    precision = _estimate_precision_by_radius(radius_meters, latitude)
    center, box = _encode(latitude, longitude, precision)
    height = box[0][1] - box[0][0]
    width = box[1][1] - box[1][0]
    center_lng = (box[0][1] + box[0][0]) / 2
    center_lat = (box[1][1] + box[1][0]) / 2
    max_lat = _valid_lat(center_lat + height)
    min_lat = _valid_lat(center_lat - height)
    max_lng = _valid_lng(center_lng + width)
    min_lng = _valid_lng(center_lng - width)

    def block(lat: float, lng: float) -> tuple[int, int]:
        prefix, _ = _encode(lat, lng, precision)
        return to_range(prefix, precision)

    return [
        block(max_lat, min_lng),
        block(max_lat, center_lng),
        block(max_lat, max_lng),
        block(center_lat, min_lng),
        to_range(center, precision),
        block(center_lat, max_lng),
        block(min_lat, min_lng),
        block(min_lat, center_lng),
        block(min_lat, max_lng),
    ]