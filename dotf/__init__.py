"""Wire protocol, UDP state relay, unit and demon logic, path finding and
client-side position smoothing for a robots-versus-demons strategy game."""

__version__ = "0.1.0"