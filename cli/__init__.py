"""cli

Command-line layer over :mod:`testenv`. Only entry scripts import this
package; :mod:`testenv` never imports it.
"""
