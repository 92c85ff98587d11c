import contextlib
import io
import json
import os
import tempfile
import unittest

import inspect_maps

from bspfile import build_bsp


class InspectMapsTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.addCleanup(self._tmp.cleanup)

    def _write(self, name: str, data: bytes) -> str:
        path = os.path.join(self.tmp, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def _run(self, *argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = inspect_maps.main(list(argv))
        return code, json.loads(out.getvalue())

    def test_scans_directory_for_bsp_files(self) -> None:
        self._write('b.bsp', build_bsp(entities='"sky" "unit2_"', texnames=[]))
        self._write('A.BSP', build_bsp(entities='"message" "Alpha"', texnames=[b'x']))
        self._write('readme.txt', b'not a map')
        code, report = self._run(self.tmp)
        self.assertEqual(code, 0)
        self.assertEqual([r['file'] for r in report['results']], ['A.BSP', 'b.bsp'])
        self.assertEqual(report['results'][0]['mapName'], 'Alpha')
        self.assertEqual(report['results'][1]['skies'], ['env/unit2_*'])

    def test_fatal_file_sets_exit_status(self) -> None:
        tiny = self._write('tiny.bsp', b'IB')
        code, report = self._run(tiny, os.path.join(self.tmp, 'missing.bsp'))
        self.assertEqual(code, 1)
        self.assertEqual(report['results'][0], {'file': 'tiny.bsp', 'fatal': 'file too small for a BSP header'})
        self.assertIn('fatal', report['results'][1])
