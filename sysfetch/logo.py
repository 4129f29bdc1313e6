"""Embedded ASCII logo."""

from __future__ import annotations

from typing import List

LOGO = """
 ██████   ██████  
████████ ████████ 
████████████████ 
 ██████████████  
  ████████████   
    ████████     
      ████       
       ██        
"""


def logo_lines(logo: str = LOGO) -> List[str]:
    """Split the logo into rows, dropping trailing blank lines but keeping a leading one."""
    return logo.rstrip("\n").split("\n")
