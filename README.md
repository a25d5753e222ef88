# showercalib

Calibration of reconstructed shower energies, plus a small provider describing
the active material of a detector.

The package offers:

- `showercalib.calibration`: the `Shower` record (energy per wire plane and a
  best plane), `make_shower()` to build a three-plane shower with the same
  energy on every plane, the `Correction` value (a factor with its
  uncertainty, printed as `factor +/- error`) and the `ShowerCalibrationGalore`
  interface that every calibration provider implements (`correction()`,
  `correction_factor()`, `report()`).
- `showercalib.scale`: `ShowerCalibrationGaloreScale`, which applies one
  uniform factor to every shower, whatever its energy or particle type.
- `showercalib.from_pid`: `ShowerCalibrationGaloreFromPID`, which reads one
  calibration curve per particle category and interpolates the correction and
  its uncertainty at the energy of the shower's best plane. The categories are
  neutral pion (111), photon (22), electron/positron (±11), muon/antimuon (±13)
  and a default for every other ID. Energies outside a curve's range are
  clamped to its ends. `CalibrationInfo` holds the calibration of one category.
- `showercalib.graphs`: calibration curves (`CalibrationGraph`), the
  `path/to/file.json:Dir/Sub` location convention
  (`split_calibration_path()`), abscissa order checks (`verify_order()`), file
  lookup along a search path (`find_file()`), and reading and writing of
  calibration directories (`read_calibration_directory()`,
  `write_calibration_directory()`).
- `showercalib.interpolation`: `LinearInterpolator`,
  `CubicSplineInterpolator` (natural spline) and `AkimaInterpolator`, and
  `create_interpolator()`, which uses Akima for five or more points, a cubic
  spline for three or four, a straight line for two, and a flat segment for a
  single point. Evaluating an interpolator outside its points gives NaN.
- `showercalib.atomic_number`: `AtomicNumber`, the atomic number of the
  active material (18, argon, unless configured otherwise).
- `showercalib.services`: `ServiceRegistry`, which builds providers lazily by
  service name (`AtomicNumberService`, `ShowerCalibrationGaloreService`), and
  `make_shower_calibration()`, which chooses the calibration implementation
  named by `service_provider` (`ShowerCalibrationGaloreScaleService` or
  `ShowerCalibrationGaloreFromPIDService`).

Configuration mistakes, such as unknown or missing parameters, raise
`showercalib.config.ConfigurationError`. Problems with calibration files raise
`showercalib.graphs.CalibrationFileError`. Unknown or unconfigured services
raise `showercalib.services.ServiceError`.

## Requirements

Python 3.10 or later. The package has no third-party dependencies; the test
suite uses pytest.

## A uniform correction

```python
from showercalib.calibration import make_shower
from showercalib.scale import ShowerCalibrationGaloreScale

calibration = ShowerCalibrationGaloreScale(1.02, 0.02)

shower = make_shower(1.0, 2, 1)      # 1 GeV on every plane, plane 2 is the best
print(calibration.correction(shower, 11))         # 1.02 +/- 0.02
print(calibration.correction_factor(shower, 11))  # 1.02
print(calibration.report())          # Uniform correction: 1.02 +/- 0.02
```

## Calibration files

A calibration file is a JSON document holding a tree of directories. A
location names the file and, optionally, a directory inside it, separated by
`:` or `/` right after the `.json` suffix: `data/calibrations.json:Showers`.
Each graph stores its points (`x`, `y`) and their errors (`ex`, `ey`); the
error curve used for the correction uncertainty is `ey`.

`write_calibration_directory()` creates missing parent directories and nested
directories, and adds to a file that already exists:

```python
from showercalib.graphs import CalibrationGraph, write_calibration_directory

energies = (0.0, 0.5, 1.0, 1.5, 2.0)
graphs = [
    CalibrationGraph(name, x=energies, y=(f,) * 5, ey=(0.1 * f,) * 5)
    for name, f in (("Pi0", 1.1), ("Photon", 1.15), ("Electron", 1.2), ("Muon", 1.05))
]
graphs.append(CalibrationGraph("Default", x=(1.1,), y=(1.1,), ey=(0.11,)))

write_calibration_directory("data/calibrations.json:Showers", graphs)
```

A graph needs at least one point, and its points must be in increasing order
of energy. A graph with a single point gives the same correction at all
energies.

## Corrections by particle type

```python
from showercalib.calibration import make_shower
from showercalib.from_pid import ShowerCalibrationGaloreFromPID

calibration = ShowerCalibrationGaloreFromPID("data/calibrations.json:Showers", None)

shower = make_shower(1.5, 2, 1)
for pdgid in (111, 22, 11, -13, 2212):
    print(pdgid, calibration.correction(shower, pdgid))

print(calibration.report())
```

A relative file path is looked up in each directory of the search path, which
is a list of directories or a string of them joined by the path separator; if
the search path is `None` it is taken from the `FW_SEARCH_PATH` environment
variable. If the file is not found there, the path is used as given.

## Configuration through services

```python
from showercalib.services import ServiceRegistry

registry = ServiceRegistry(
    {
        "AtomicNumberService": {"AtomicNumber": 54},
        "ShowerCalibrationGaloreService": {
            "service_provider": "ShowerCalibrationGaloreScaleService",
            "factor": 1.02,
            "error": 0.02,
        },
    },
    None,
)

print(registry.provider("AtomicNumberService").z)  # 54
calibration = registry.provider("ShowerCalibrationGaloreService")
```

The `ShowerCalibrationGaloreFromPIDService` implementation takes a single
`CalibrationFile` parameter with the location of the calibration directory.
Providers are created on first request, and the same instance is returned
afterwards.

## What the package does not do

It is a library only: there is no command-line program. Calibration curves are
read from and written to the JSON format described above only; no other file
format is supported.