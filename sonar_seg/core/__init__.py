from .geometry import ScanGeometry, beam_direction, deg_to_rad, to_pixel
