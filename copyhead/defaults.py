# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""The documented starter config written by ``copyhead --generate-config``."""

DEFAULT_CONFIG = r"""# Set to true to rewrite files instead of printing the licensed content.
change_in_place: false

# Regexes which, if matched anywhere in a file path, exclude the file from
# getting a license header.
excludes:
  - \.gitignore
  - .*lock
  - \.git/.*
  - \.copyhead\.yml
  - README.*
  - LICENSE.*
  - .*\.(md|rst|txt)

# Licenses used on this project and the files they apply to. Rules are
# checked in order and the first one whose "files" selector matches wins.
#
# No license is configured by default.
licenses:
  # "files" is a regex, a list of regexes or the string "any".
  # - files: any
  #
  #   The license identifier. Must be a valid SPDX identifier when
  #   auto_template is true (https://spdx.org/licenses/).
  #   ident: MIT
  #
  #   Copyright holders, rendered as "Name <email>" and joined with commas.
  #   authors:
  #     - name: Your Name Here
  #       email: you@yourdomain.com
  #
  #   Template rendered before comment characters are applied. Variables:
  #    - [year]: the current year, or "start, end" when start_year is set
  #    - [name of author]: the authors list
  #    - [ident]: the license identifier
  #   template: |
  #     Copyright [year] [name of author]. All rights reserved. Use of
  #     this source code is governed by the [ident] license that can be
  #     found in the LICENSE file.
  #
  #   Fetch the standard header for ident from the SPDX API instead of
  #   using template.
  #   auto_template: false
  #
  #   Optional fixed years. "year" is an alias for end_year.
  #   start_year: 2019
  #   end_year: 2024
  #
  #   Derive the year range of each file from its git history.
  #   use_dynamic_years: false
  #
  #   Regexes matching older headers that should be swapped for this one.
  #   replaces: []
  #
  #   Join pre-wrapped template lines back into paragraphs before
  #   wrapping them to the commenter's column width.
  #   unwrap_text: true

# Comment syntax per file extension. Checked in order, first match wins.
comments:
  - extensions:
      - js
      - rs
      - go
    columns: 80
    # A line commenter prefixes every header line with comment_char and
    # appends trailing_lines blank lines.
    commenter:
      type: line
      comment_char: "//"
      trailing_lines: 0
  - extensions:
      - css
      - cpp
      - c
    columns: 80
    # A block commenter wraps the header in start_block_char and
    # end_block_char, prefixing each line with per_line_char if given.
    commenter:
      type: block
      start_block_char: "/*\n"
      end_block_char: "*/"
      per_line_char: "*"
      trailing_lines: 0
  - extension: html
    columns: 80
    commenter:
      type: block
      start_block_char: "<!--\n"
      end_block_char: "-->"
  - extensions:
      - el
      - lisp
    columns: 80
    commenter:
      type: line
      comment_char: ";;;"
      trailing_lines: 0
  # "any" matches every extension, so keep it last.
  - extension: any
    columns: 80
    commenter:
      type: line
      comment_char: "#"
      trailing_lines: 0
"""
