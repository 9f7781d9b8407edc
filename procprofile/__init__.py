# Processing profile core: parameter sets, profile files and partial merges.

from procprofile.config.settings import APP_VERSION as __version__
