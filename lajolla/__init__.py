"""Building blocks of a physically based path tracer: frames, spectra, transforms, sampling tables, microfacet BSDFs, filters, media, shapes, scenes and lights."""

__version__ = "0.1.0"