"""Propagation results data saving module."""

from pathlib import Path

import numpy as np
from h5py import File

from ..logger import get_logger

logger = get_logger(__name__)


class GridCondition:
    """Save condition distributing `n` save points evenly over [zmin, zmax]."""

    def __init__(self, zmin, zmax, n):
        self.grid = np.linspace(zmin, zmax, n)
        self.n = n

    def __call__(self, z, saved):
        """Return (save, z_save) for the next pending save point."""
        if saved < self.n and self.grid[saved] <= z:
            return True, self.grid[saved]
        return False, 0.0


class _OutputBase:
    """Shared bookkeeping of the output handlers."""

    def __init__(self, zmin, zmax, n, ydims, statsfun=None, yname="Ew", zname="z"):
        self.save_cond = GridCondition(zmin, zmax, n)
        self.ydims = tuple(ydims)
        self.statsfun = statsfun
        self.yname = yname
        self.zname = zname
        self.saved = 0

    def save_step(self, y, z, dz=0.0, yfun=None):
        """
        Save every pending point up to the current position.

        Parameters
        ----------
        y : ndarray
            Current solution.
        z : float
            Current propagation position.
        dz : float, default: 0.0
            Current step size, passed to `statsfun`.
        yfun : callable, optional
            `yfun(z)` returning the solution interpolated at `z`.
            Without it `y` is saved at every pending point.

        """
        save, zs = self.save_cond(z, self.saved)
        while save:
            yi = y if yfun is None else yfun(zs)
            stats = self.statsfun(y, z, dz) if self.statsfun is not None else {}
            self._write(np.asarray(yi), zs, stats)
            self.saved += 1
            save, zs = self.save_cond(z, self.saved)

    def _write(self, y, z, stats):
        raise NotImplementedError("Output must include _write()")


class MemoryOutput(_OutputBase):
    """Handles propagation data storage in memory."""

    def __init__(self, zmin, zmax, n, ydims, statsfun=None, yname="Ew", zname="z"):
        super().__init__(zmin, zmax, n, ydims, statsfun, yname, zname)
        self.data = {
            yname: np.zeros(self.ydims + (n,), dtype=np.complex128),
            zname: np.zeros(n),
            "stats": {},
        }

    def _write(self, y, z, stats):
        self.data[self.yname][..., self.saved] = y
        self.data[self.zname][self.saved] = z
        for key, value in stats.items():
            self.data["stats"].setdefault(key, []).append(value)

    def save_metadata(self, meta, force=False):
        """Store extra entries; existing keys need `force=True`."""
        for key, value in meta.items():
            if key in self.data and not force:
                raise KeyError(f"'{key}' is already saved")
            self.data[key] = value

    def __getitem__(self, key):
        return self.data[key]


class HDF5Output(_OutputBase):
    """Handles propagation data storage in an HDF5 file."""

    def __init__(self, fpath, zmin, zmax, n, ydims, statsfun=None, yname="Ew",
                 zname="z", compression="gzip", compression_opts=4):
        """Initialize output file.

        Parameters
        ----------
        fpath : str or Path
            File to create. It must not exist.
        zmin, zmax : float
            Propagation range.
        n : int
            Number of save points.
        ydims : tuple of int
            Shape of one saved solution.
        statsfun : callable, optional
            `statsfun(y, z, dz)` returning a dict of scalars to save.
        compression : str, default: "gzip"
            Compression method for the solution dataset.
        compression_opts : integer, default: 4
            Compression level chosen.

        """
        super().__init__(zmin, zmax, n, ydims, statsfun, yname, zname)
        self.fpath = Path(fpath)
        if self.fpath.exists():
            raise FileExistsError(f"Output file already exists: {self.fpath}")
        self.fpath.parent.mkdir(parents=True, exist_ok=True)

        with File(self.fpath, "w") as f:
            f.create_dataset(
                yname,
                shape=self.ydims + (0,),
                maxshape=self.ydims + (None,),
                dtype=np.complex128,
                chunks=self.ydims + (1,),
                compression=compression,
                compression_opts=compression_opts,
            )
            f.create_dataset(zname, shape=(0,), maxshape=(None,), dtype=np.float64)
            f.create_group("stats")
        logger.info("Writing output to %s", self.fpath)

    def _write(self, y, z, stats):
        with File(self.fpath, "r+") as f:
            idx = self.saved
            dset = f[self.yname]
            dset.resize(idx + 1, axis=len(self.ydims))
            dset[..., idx] = y
            f[self.zname].resize((idx + 1,))
            f[self.zname][idx] = z

            grp = f["stats"]
            for key, value in stats.items():
                if key not in grp:
                    grp.create_dataset(key, shape=(0,), maxshape=(None,), dtype=np.float64)
                grp[key].resize((idx + 1,))
                grp[key][idx] = value

    def save_metadata(self, meta, force=False):
        """Store extra datasets; existing keys need `force=True`."""
        with File(self.fpath, "r+") as f:
            for key, value in meta.items():
                if key in f:
                    if not force:
                        raise KeyError(f"'{key}' is already saved")
                    del f[key]
                f.create_dataset(key, data=value)
