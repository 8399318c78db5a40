from aiocache import SimpleMemoryCache, caches

# Cache expiration times (in seconds)
WEATHER_PAYLOAD_EXPIRE = 600  # 10 minutes - OpenWeatherMap's current-conditions update rate

# Configure default cache
caches.set_config({
    'default': {
        'cache': "aiocache.SimpleMemoryCache",
        'serializer': {
            'class': "aiocache.serializers.PickleSerializer"
        },
        'ttl': WEATHER_PAYLOAD_EXPIRE,
    }
})

def get_cache() -> SimpleMemoryCache:
    """Get the default cache instance."""
    return caches.get('default')  # type: ignore

def location_cache_key(namespace: str, lat: float, lon: float) -> str:
    """Cache key for data tied to one location.

    Returns:
        str: Cache key in format {namespace}:{lat},{lon}
    """
    return f"{namespace}:{lat:.4f},{lon:.4f}"
