"""Full-screen terminal interface: screen state, panes, rendering and the curses loop."""