class WeatherSourceError(Exception):
    """Base exception for weather provider errors."""
    pass

class WeatherFetchError(WeatherSourceError):
    """Raised when the provider cannot be reached or returns an error status."""
    pass

class WeatherParseError(WeatherSourceError):
    """Raised when a provider response is missing fields or has the wrong shape."""
    pass

class RenderError(Exception):
    """Base exception for display rendering errors."""
    pass

class TemplateNotFoundError(RenderError):
    """Raised when the SVG template cannot be read."""
    pass

class TemplateStructureError(RenderError):
    """Raised when the SVG template lacks an element the renderer fills in."""
    pass
