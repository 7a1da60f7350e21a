import unittest

from duplint.index.binary import extension_of, is_text_file


class BinaryClassificationTest(unittest.TestCase):
    def test_binary_extensions(self):
        self.assertFalse(is_text_file('foo.png'))
        self.assertFalse(is_text_file('images/towelie.JPEG'))
        self.assertFalse(is_text_file('dist/archive.tar.gz'))

    def test_text_extensions(self):
        self.assertTrue(is_text_file('bar.txt'))
        self.assertTrue(is_text_file('src/main.py'))
        self.assertTrue(is_text_file('Makefile'))

    def test_extension_of_uses_file_name_only(self):
        self.assertEqual('', extension_of('some.dir/README'))
        self.assertEqual('css', extension_of('css/dribble.css'))


if __name__ == '__main__':
    unittest.main()
