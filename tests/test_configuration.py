from unittest import TestCase

from rtcsdp import ExtensionKey, RTCSdpConfiguration


class RTCSdpConfigurationTest(TestCase):
    def test_defaults(self):
        configuration = RTCSdpConfiguration()
        self.assertEqual(configuration.extensionKey, ExtensionKey.URI)
        self.assertEqual(configuration.restrictedKinds, ["audio", "video"])
        self.assertEqual(configuration.lineSeparator, "\n")

    def test_restricted_kinds_not_shared(self):
        a = RTCSdpConfiguration()
        a.restrictedKinds.append("application")
        self.assertEqual(RTCSdpConfiguration().restrictedKinds, ["audio", "video"])

    def test_bad_line_separator(self):
        with self.assertRaises(ValueError) as cm:
            RTCSdpConfiguration(lineSeparator="\r")
        self.assertEqual(
            str(cm.exception),
            "'lineSeparator' must be in ['\\n', '\\r\\n'] (got '\\r')",
        )
