import os
import pathlib
import tempfile

import requests

from . import AirportDataError, parse_lines
from ..config import config
from ..log import log


def fetch_airports(url=None, dest=None, timeout=None):
    '''
    Download an OpenFlights-format airports.dat and write it to `dest`
    (defaults to the configured data file). The file is replaced atomically and
    only after the download has been checked to contain at least one usable
    airport.

    Returns the pathlib.Path that was written.
    '''
    if url is None:
        url = config.gimme('airports.source_url')
    if dest is None:
        dest = config.gimme('airports.data_file')
    if dest is None:
        raise AirportDataError('no destination given and airports.data_file is not configured')
    if timeout is None:
        timeout = config.gimme('airports.timeout')

    dest = pathlib.Path(dest)

    log.print(f'fetching airport data from {url}')

    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    response.encoding = response.encoding or 'utf-8'

    text = response.text
    count = sum(1 for _ in parse_lines(text.splitlines()))
    if count == 0:
        raise AirportDataError(f'no usable airports in response from {url}')

    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=f'.{dest.name}.')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        os.replace(tmp_name, dest)
    except BaseException:
        os.unlink(tmp_name)
        raise

    log.print(f'wrote {count} airports to {dest}')

    return dest
