"""Shared fixtures: a small blog laid out on disk the way Jekyll expects."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from folio.core.config import FolioConfig

ABOUT_PAGE = """\
---
layout: page
title: About
permalink: /about/
---

I am a backend developer writing about Kubernetes and testing.
"""

KUBERNETES_POST = """\
---
layout: post
title: "Configuring applications on Kubernetes"
date: 2017-01-15 12:00:00 +0100
categories: kubernetes configuration
---

Keep configuration out of the image and mount it instead:

```yaml
apiVersion: v1
kind: ConfigMap
metadata:
  name: app-config
```
"""

CONTAINERS_POST = """\
---
layout: post
title: "Integration tests with throwaway containers"
date: 2017-03-02 09:30:00 +0100
categories: [testing, docker]
---

Start the database before the suite and stop it afterwards:

```java
public class DatabaseInitializer {
    private static final PostgreSQLContainer<?> DB = new PostgreSQLContainer<>("postgres:9.6");
}
```

The container log shows the lifecycle:

```log
Creating container for image: postgres:9.6
Container postgres:9.6 started
```
"""

BUILDER_POST = """\
---
layout: post
title: "Object builders for test data"
date: 2017-05-20
categories: testing
---

{% highlight java %}
public abstract class PersistenceBuilder<T> {
    public abstract T build();
}
{% endhighlight %}
"""


def write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_folio_env(monkeypatch):
    """Keep FOLIO_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("FOLIO_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def blog(tmp_path: Path) -> Path:
    """A clean blog: one page and three posts."""
    write(tmp_path, "about.md", ABOUT_PAGE)
    write(tmp_path, "_posts/2017-01-15-configuring-kubernetes.md", KUBERNETES_POST)
    write(tmp_path, "_posts/2017-03-02-throwaway-containers.md", CONTAINERS_POST)
    write(tmp_path, "_posts/2017-05-20-object-builders.md", BUILDER_POST)
    write(tmp_path, "README.md", "# my blog\n\nSource of the blog.\n")
    write(tmp_path, "_layouts/post.html", "<article>{{ content }}</article>\n")
    return tmp_path


@pytest.fixture
def blog_config(blog: Path) -> FolioConfig:
    return FolioConfig.load(blog)


@pytest.fixture
def write_doc():
    """Helper that writes a file below a root directory and returns its path."""
    return write
