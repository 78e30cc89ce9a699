# src/rendering/templates.py — v1
"""Fixed jinja2 templates for the Tekton PipelineRun and the revision-run ConfigMap.

Scalar and list params are emitted sorted by name; workspaces keep request order.
"""

from __future__ import annotations

PIPELINE_RUN_TEMPLATE = """\
apiVersion: tekton.dev/v1beta1
kind: PipelineRun
metadata:
  name: "{{ name_prefix }}-{{ stage }}-{{ name }}-{{ name_suffix }}"
  namespace: {{ namespace }}
  labels:
    argocd.argoproj.io/instance: {{ argocd_instance }}
    stagetime/commit: "{{ commit_id }}"
    stagetime/repo: {{ repo_name }}
    stagetime/author: {{ author }}
    stagetime/stage: "{{ stage }}"
    tekton.dev/pipeline: {{ pipeline_ref }}
spec:
  serviceAccountName: {{ service_account }}
  timeout: {{ timeout }}
  pipelineRef:
    name: {{ pipeline_ref }}
  params:{% for param, value in params | dictsort %}
  - name: {{ param }}
    value: {{ value }}{% endfor %}{% for param, values in list_params | dictsort %}
  - name: {{ param }}
    value:{% for item in values %}
      - {{ item }}{% endfor %}{% endfor %}
  workspaces:{% for workspace in workspaces %}
  - name: {{ workspace.name }}
    {{ workspace.kind }}:
      {{ workspace.short_name }}: {{ workspace.reference }}{% endfor %}
"""

REVISION_RUN_TEMPLATE = """\
apiVersion: v1
kind: ConfigMap
metadata:
  name: {{ tracking_name }}
  namespace: {{ namespace }}
  labels:
    stagetime/commit: "{{ commit_id }}"
    stagetime/repo: {{ repository }}
data:
  revisionRun: |
    repository: {{ repository }}
    revision: {{ commit_id }}
    stages:{% for stage in stages %}
      - "{{ stage }}"{% endfor %}
    pipelineRuns:{% for run in pipeline_runs %}
      - {{ run }}{% endfor %}
"""
