"""
Example: Comparing Models with GeoGrid

This example builds two synthetic tomographic models, takes cross sections
through them and combines them into vote maps.
"""

import numpy as np

import geogrid as gg

# ============================================================================
# Example 1: Build Two Synthetic Models
# ============================================================================

print("="*70)
print("Example 1: Build Two Synthetic Models")
print("="*70)

lon, lat, depth = gg.lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), np.arange(-300, 1, 25))

# A slow anomaly centred at (15, 35) and -150 km
anomaly = np.exp(-((lon - 15) ** 2 + (lat - 35) ** 2) / 4 - ((depth + 150) / 60) ** 2)
model_a = gg.GeoData(lon, lat, depth, {"dVp": -3.0 * anomaly, "Vs": 4.5 - 0.4 * anomaly})

# The second model sees the same anomaly slightly shifted, on a coarser grid
lon2, lat2, depth2 = gg.lonlatdepth_grid(np.arange(11, 22, 2), np.arange(31, 42, 2), np.arange(-350, 1, 50))
anomaly2 = np.exp(-((lon2 - 16) ** 2 + (lat2 - 35) ** 2) / 4 - ((depth2 + 170) / 60) ** 2)
model_b = gg.GeoData(lon2, lat2, depth2, {"dVs": -2.0 * anomaly2})

gg.print_grid_info(model_a)
gg.print_grid_info(model_b)

# ============================================================================
# Example 2: Cross Sections
# ============================================================================

print("\n" + "="*70)
print("Example 2: Cross Sections")
print("="*70)

horizontal = gg.cross_section(model_a, depth_level=-150.0)
print(f"\nHorizontal section at the nearest depth level: {horizontal.shape}")

vertical = gg.cross_section(model_a, lon_level=15.0, interpolate=True, dims=(60, 40))
print(f"Interpolated vertical section: {vertical.shape}")

diagonal = gg.cross_section(model_a, start=(10, 30), end=(20, 40), dims=(80, 40))
print(f"Diagonal section: {diagonal.shape}")

# ============================================================================
# Example 3: Vote Maps
# ============================================================================

print("\n" + "="*70)
print("Example 3: Vote Maps")
print("="*70)

vm = gg.votemap([model_a, model_b], ["dVp<-1", "dVs<-0.7"], dims=(40, 40, 30))
print(f"\nBoolean vote map: {vm.shape}, cells with 2 votes: {int(np.sum(vm['votemap'] == 2))}")

vm_stat = gg.votemap_statistical(
    [model_a, model_b], ["dVp", "dVs"], dims=(40, 40, 30),
    threshold_stadev=-1.0, modelsize="maximum", votes=gg.VoteMode.RELATIVE
)
print(f"Statistical vote map: max fraction {float(np.max(vm_stat['votemap_fraction'])):.2f}")

# ============================================================================
# Example 4: Export to xarray
# ============================================================================

print("\n" + "="*70)
print("Example 4: Export to xarray")
print("="*70)

ds = vm.to_xarray(chunks="auto")
print(ds)
