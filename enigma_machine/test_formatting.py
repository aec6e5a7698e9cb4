import unittest as ut

from enigma_machine import formatting


class FormattingTest(ut.TestCase):
    def test_clean_text(self):
        self.assertEqual(formatting.clean_text(' hello World\n'), 'HELLOWORLD')
        self.assertEqual(formatting.clean_text('a-b\tc 1'), 'A-BC1')

    def test_group_blocks(self):
        self.assertEqual(formatting.group_blocks('FQGAHW'), 'FQGAH W')
        self.assertEqual(formatting.group_blocks('ABCDE'), 'ABCDE')
        self.assertEqual(formatting.group_blocks(''), '')

    def test_line_break_after_ten_blocks(self):
        text = 'A' * 50 + 'BBBBBC'
        lines = formatting.group_blocks(text).split('\n')
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0], ' '.join(['AAAAA'] * 10))
        self.assertEqual(lines[1], 'BBBBB C')


if __name__ == '__main__':
    ut.main()
