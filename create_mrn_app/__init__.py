"""create-mrn-app -- scaffold modern full-stack JavaScript applications.

The package is split into three layers:

- ``create_mrn_app.resolver``  -- compatibility tables, selection validation,
  configuration resolution and layout classification.
- ``create_mrn_app.scaffolder`` -- the Jinja2 template catalog, per-framework
  generators and the manifest merger.
- ``create_mrn_app.runner``     -- package-manager, runtime and git commands.

``create_mrn_app.pipeline`` ties them together behind the ``create-mrn-app``
command.
"""

__version__ = "0.2.0"
