import itertools
import os
import unittest
from pathlib import Path

from dir_archiver.utils import path_utils


@unittest.skipUnless(os.name == 'posix', 'posix paths only')
class PathUtilsTestCase(unittest.TestCase):
	def test_0_normalize(self):
		self.assertEqual(Path('/a/c'), path_utils.normalize('/a/b/../c/.'))
		self.assertEqual(Path('/a/b'), path_utils.normalize('/a//b/'))
		self.assertEqual(Path(os.getcwd()) / 'x', path_utils.normalize('x'))

	def test_1_common_base_single(self):
		self.assertEqual(Path('/a'), path_utils.common_base(['/a/b']))
		self.assertEqual(Path('/a/b'), path_utils.common_base([Path('/a/b/c')]))
		self.assertEqual(Path('/'), path_utils.common_base(['/']))

	def test_2_common_base_multiple(self):
		self.assertEqual(Path('/a'), path_utils.common_base(['/a/b', '/a/c']))
		self.assertEqual(Path('/foo'), path_utils.common_base(['/foo/ba', '/foo/bar']))
		self.assertEqual(Path('/x/y'), path_utils.common_base(['/x/y/z/1', '/x/y/2', '/x/y/z/3']))
		self.assertEqual(Path('/'), path_utils.common_base(['/a/b', '/c/d']))

	def test_3_common_base_empty(self):
		with self.assertRaises(ValueError):
			path_utils.common_base([])

	def test_4_common_base_is_deepest_shared_prefix(self):
		candidates = ['/a', '/a/b', '/a/b/c', '/a/bc', '/a/b/d/e', '/f/g', '/a/b/c/d']
		for n in (2, 3):
			for paths in itertools.combinations(candidates, n):
				base = path_utils.common_base(paths)
				for p in paths:
					self.assertTrue(path_utils.is_same_or_inside(Path(p), base), (paths, base))
				deeper = [base / name for name in {Path(p).relative_to(base).parts[0] for p in paths if Path(p) != base}]
				for d in deeper:
					self.assertFalse(all(path_utils.is_same_or_inside(Path(p), d) for p in paths), (paths, base, d))

	def test_5_remove_nested_paths(self):
		def check(expected, paths):
			self.assertEqual([Path(p) for p in expected], path_utils.remove_nested_paths([Path(p) for p in paths]))

		check(['/a'], ['/a', '/a/b'])
		check(['/a'], ['/a/b', '/a'])
		check(['/a/b'], ['/a/b', '/a/b'])
		check(['/a/b', '/a/bc'], ['/a/b', '/a/bc'])
		check(['/x', '/a'], ['/x', '/a/b', '/a', '/x/y/z', '/a'])
		check([], [])

	def test_6_to_archive_name(self):
		self.assertEqual('b/c.txt', path_utils.to_archive_name(Path('/a/b/c.txt'), Path('/a')))
		self.assertEqual('a/b', path_utils.to_archive_name(Path('/a/b'), Path('/')))
		with self.assertRaises(ValueError):
			path_utils.to_archive_name(Path('/x/b'), Path('/a'))


if __name__ == '__main__':
	unittest.main()
