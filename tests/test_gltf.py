import unittest
import base64
import contextlib
import io
import json
import pathlib
import tempfile
import gltfdump
import gltfdump.__main__
from gltfdump.types import BinaryDataRequired, GltfError, UnsupportedInput
from glb_builder import make_glb, triangle_bin, triangle_gltf


class TestGltf(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = pathlib.Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def write_gltf(self, name: str, gltf: dict) -> pathlib.Path:
        path = self.dir / name
        path.write_text(json.dumps(gltf), encoding='utf-8')
        return path

    def test_glb(self):
        path = self.dir / 'triangle.glb'
        path.write_bytes(make_glb(triangle_gltf(), triangle_bin()))
        report = gltfdump.extract_path(path)
        self.assertEqual(42, report['metadata']['totalBytes'])
        self.assertEqual(1, report['metadata']['meshCount'])
        self.assertEqual(
            [0, 1, 2], report['meshes'][0]['primitives'][0]['indices']['values'])

    def test_glb_without_bin(self):
        path = self.dir / 'empty.glb'
        path.write_bytes(make_glb({'asset': {'generator': 'X', 'version': '2.0'}}))
        with self.assertRaises(BinaryDataRequired):
            gltfdump.extract_path(path)
        report = gltfdump.extract_path(path, require_binary=False)
        self.assertEqual('X', report['metadata']['generator'])
        self.assertNotIn('totalBytes', report['metadata'])

    def test_gltf_bin(self):
        gltf = triangle_gltf()
        gltf['buffers'][0]['uri'] = 'my%20triangle.bin'
        (self.dir / 'my triangle.bin').write_bytes(triangle_bin())
        report = gltfdump.extract_path(self.write_gltf('triangle.gltf', gltf))
        self.assertEqual(42, report['metadata']['totalBytes'])
        self.assertEqual([[0, 0, 0], [1, 0, 0], [0, 1, 0]],
                         report['meshes'][0]['primitives'][0]['attributes']['POSITION']['values'])

    def test_gltf_data_uri(self):
        gltf = triangle_gltf()
        gltf['buffers'][0]['uri'] = 'data:application/octet-stream;base64,' + \
            base64.b64encode(triangle_bin()).decode('ascii')
        report = gltfdump.extract_path(self.write_gltf('triangle.gltf', gltf))
        self.assertEqual(42, report['metadata']['totalBytes'])

    def test_gltf_without_uri(self):
        with self.assertRaises(GltfError):
            gltfdump.extract_path(self.write_gltf('triangle.gltf', triangle_gltf()))

    def test_gltf_without_uri_allowed(self):
        gltf = triangle_gltf()
        gltf['meshes'] = []
        report = gltfdump.extract_path(self.write_gltf('triangle.gltf', gltf), require_binary=False)
        self.assertEqual('test', report['metadata']['generator'])
        self.assertNotIn('totalBytes', report['metadata'])
        self.assertEqual(1, report['metadata']['materialCount'])

    def test_gltf_missing_bin(self):
        gltf = triangle_gltf()
        gltf['buffers'][0]['uri'] = 'missing.bin'
        with self.assertRaises(OSError):
            gltfdump.extract_path(self.write_gltf('triangle.gltf', gltf))

    def test_unsupported(self):
        path = self.dir / 'triangle.obj'
        path.write_text('v 0 0 0\n')
        with self.assertRaises(UnsupportedInput):
            gltfdump.extract_path(path)

    def test_main(self):
        path = self.dir / 'triangle.glb'
        path.write_bytes(make_glb(triangle_gltf(), triangle_bin()))
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(0, gltfdump.__main__.main([str(path), '--limit', '2']))
        self.assertIn('Total bytes processed: 42', stdout.getvalue())

        report = json.loads((self.dir / 'triangle.glb.json').read_text(encoding='utf-8'))
        self.assertEqual(2, report['metadata']['truncationLimit'])
        position = report['meshes'][0]['primitives'][0]['attributes']['POSITION']
        self.assertEqual([[0, 0, 0], [1, 0, 0]], position['truncatedValues'])

    def test_main_error(self):
        path = self.dir / 'broken.glb'
        path.write_bytes(b'not a glb')
        with self.assertLogs('gltfdump', 'ERROR'):
            self.assertEqual(1, gltfdump.__main__.main([str(path)]))
        self.assertFalse((self.dir / 'broken.glb.json').exists())


if __name__ == '__main__':
    unittest.main()
